"""
Entry point for the CRUD core HTTP adapter
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from crud_core.app import create_app
from crud_core.config.settings import PORT

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting CRUD core on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
