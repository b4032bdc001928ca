"""
Server-wide constants.
"""

PROJECT_NAME = "GTO Workforce"
VERSION = "0.1.0"
SCHEMA_VERSION = "v1"
API_V1_STR = "/api/v1"
