"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, the GET primitive
    ├── normalize.py      # Raw payload -> schemas models
    └── {feature}.py      # Fetch functions (one per endpoint)

Only ``weatherapi/`` exists today.
"""
