"""
Configuration settings for the CRUD core
"""

import os
import logging

# Configure logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD or QA
PORT = int(os.getenv("PORT", 8080))

# Store configuration
KEY_POLICIES = ("caller", "auto")
KEY_POLICY = os.getenv("KEY_POLICY", "caller").strip().lower()
RESOURCES = [
    name.strip()
    for name in os.getenv("RESOURCES", "journal_entries,users").split(",")
    if name.strip()
]
DEFAULT_RESOURCE = os.getenv("DEFAULT_RESOURCE", RESOURCES[0] if RESOURCES else "")

# Construct every registered service at startup instead of on first use
EAGER_INIT = os.getenv("EAGER_INIT", "false").lower() in {"1", "true", "yes"}

logger.info(f"Environment: {ENV}")
logger.info(f"Resources: {', '.join(RESOURCES)} (key policy: {KEY_POLICY})")

# Validate settings
if KEY_POLICY not in KEY_POLICIES:
    raise ValueError(f"KEY_POLICY must be one of {KEY_POLICIES}, got {KEY_POLICY!r}")
if not RESOURCES:
    raise ValueError("RESOURCES environment variable must name at least one resource")
