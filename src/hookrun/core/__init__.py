"""Core hookrun functionality: script execution and configuration."""
