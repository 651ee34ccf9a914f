"""Route modules for the goalpath web interface."""
