"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Game Settings
    WORD_LENGTH = int(os.getenv('WORD_LENGTH', 6))
    MAX_ATTEMPTS = int(os.getenv('MAX_ATTEMPTS', 6))
    WORDS_FILE = os.getenv('WORDS_FILE')  # None -> bundled palavras.json

    # Persistence Settings ("memory", "json" or "mongo")
    PERSISTENCE_BACKEND = os.getenv('PERSISTENCE_BACKEND', 'memory')
    STATE_DIR = os.getenv('STATE_DIR', 'state')
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB = os.getenv('MONGO_DB', 'termo_game')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    PERSISTENCE_BACKEND = os.getenv('PERSISTENCE_BACKEND', 'json')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    PERSISTENCE_BACKEND = 'memory'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
