"""
cmdfeeder - Buffered Command Delivery

Buffers outbound commands for a controlled device, pauses and resumes
delivery, and releases one command at a time to whatever transport
subscribes to it.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- feeder: Command buffer with hold/resume and change tracking
- filters: Command transformations applied on release
- session: One feeder per device connection
- config: Environment-based configuration
- api: REST API models
"""

__version__ = "1.0.0"
