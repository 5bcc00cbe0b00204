"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""
    
    # API
    BOOK_API_URL = os.getenv("BOOK_API_URL", "http://localhost:8080")
    
    # Unset means requests wait indefinitely
    BOOK_API_TIMEOUT = os.getenv("BOOK_API_TIMEOUT")
    
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    
    @property
    def TIMEOUT(self):
        """Request timeout in seconds, or None."""
        if not self.BOOK_API_TIMEOUT:
            return None
        return float(self.BOOK_API_TIMEOUT)
