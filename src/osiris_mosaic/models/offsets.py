"""
Result model for the offset pipeline.

MosaicOffsets is the only product of determine_offsets(): one (dx, dy)
pixel offset per exposure, relative to the first exposure, together with
the scale and position angle that produced them.

Example:
    >>> offsets = determine_offsets(headers, "cube", "telescope")
    >>> for dx, dy in offsets.pairs():
    ...     print(f"{dx:8.2f} {dy:8.2f}")
    >>>
    >>> # Header values for the X_OFF / Y_OFF writer
    >>> updates = offsets.to_header_updates()
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from osiris_mosaic.models.enums import Format, Mode


class MosaicOffsets(BaseModel):
    """Pixel offsets of a batch of exposures.

    Attributes:
        scale: Resolved plate scale (arcsec/pixel)
        position_angle: Resolved reference position angle (radians)
        format: Data product format the offsets apply to
        mode: Coordinate mode the offsets were derived in
        x_off: X offsets in pixels, first element is 0
        y_off: Y offsets in pixels, first element is 0
    """

    model_config = ConfigDict(frozen=True)

    scale: float = Field(..., gt=0, description="Plate scale (arcsec/pixel)")
    position_angle: float = Field(..., description="Reference position angle (rad)")
    format: Format
    mode: Mode
    x_off: list[float] = Field(..., min_length=1)
    y_off: list[float] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_lengths(self) -> MosaicOffsets:
        if len(self.x_off) != len(self.y_off):
            raise ValueError(
                f"x_off has {len(self.x_off)} entries but y_off has {len(self.y_off)}"
            )
        return self

    @classmethod
    def from_array(
        cls,
        offsets: np.ndarray,
        *,
        scale: float,
        position_angle: float,
        format: Format,
        mode: Mode,
    ) -> MosaicOffsets:
        """Build from a (2, n) offset matrix."""
        return cls(
            scale=scale,
            position_angle=position_angle,
            format=format,
            mode=mode,
            x_off=[float(v) for v in offsets[0]],
            y_off=[float(v) for v in offsets[1]],
        )

    def __len__(self) -> int:
        return len(self.x_off)

    def as_array(self) -> np.ndarray:
        """Return the (2, n) offset matrix."""
        return np.array([self.x_off, self.y_off], dtype=np.float64)

    def pairs(self) -> list[tuple[float, float]]:
        """Return one (dx, dy) tuple per exposure."""
        return list(zip(self.x_off, self.y_off))

    def to_header_updates(
        self,
        x_key: str = "X_OFF",
        y_key: str = "Y_OFF",
    ) -> list[dict[str, Any]]:
        """Header values to write back, one dict per exposure.

        Args:
            x_key: Keyword receiving the X offset
            y_key: Keyword receiving the Y offset

        Returns:
            List of {x_key: dx, y_key: dy} dicts in exposure order
        """
        return [{x_key: dx, y_key: dy} for dx, dy in self.pairs()]
