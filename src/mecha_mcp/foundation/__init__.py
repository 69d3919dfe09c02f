"""Foundation: errors and configuration."""
