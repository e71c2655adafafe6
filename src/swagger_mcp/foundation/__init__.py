"""Foundation: configuration and error handling."""
