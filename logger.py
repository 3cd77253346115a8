"""
Image Editor v1.2 - Logging Module
==================================
Centralized logging system
"""

import logging
import sys
from typing import Optional
import config

class EditorLogger:
    """Centralized logger for the editor"""

    _instance: Optional[logging.Logger] = None

    @classmethod
    def get_logger(cls, name: str = "image_editor") -> logging.Logger:
        """Get or create logger instance"""
        if cls._instance is None:
            cls._instance = cls._setup_logger("image_editor")
        if name == "image_editor":
            return cls._instance
        # Module loggers propagate into the shared handlers
        return cls._instance.getChild(name)

    @classmethod
    def _setup_logger(cls, name: str) -> logging.Logger:
        """Setup logger with file and console handlers"""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))

        # Prevent duplicate handlers
        if logger.handlers:
            return logger

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter(
            '%(levelname)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)

        # File handler
        try:
            log_path = config.get_project_root() / config.LOG_FILE
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(config.LOG_FORMAT)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)
        except Exception as e:
            print(f"Warning: Could not setup file logging: {e}")

        logger.addHandler(console_handler)
        return logger

# Convenience function
def get_logger(name: str = "image_editor") -> logging.Logger:
    """Get logger instance"""
    return EditorLogger.get_logger(name)
