"""
OSIRIS Mosaic - Test Suite

Test Organization:
- test_config.py: Settings models, TOML loading, environment overrides
- test_utils.py: structlog setup and context helpers
- test_models.py: Mode/Format parsing and MosaicOffsets
- test_headers.py: Header accessor and FITS header I/O
- test_validation.py: Batch consistency check
- test_scale.py: Plate scale resolution
- test_position_angle.py: Position angle resolution
- test_transform.py: coord2det
- test_pipeline.py: determine_offsets end to end
- test_quality.py: Quality bit codec
- test_cli.py: Click commands

Fixtures are in tests/fixtures/:
- factories.py: HeaderFactory for generating exposure headers

Run tests:
    $ pdm run pytest tests/ -v
"""
