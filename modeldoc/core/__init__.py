"""Core of modeldoc: type universe, documentation engine, configuration and logging."""
