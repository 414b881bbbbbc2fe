"""Infrastructure modules for resjson-sync.

Centralized infrastructure components:
- configuration: Settings loading (Settings, load_settings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and the settle-all fan-out
"""
