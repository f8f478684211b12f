"""Code generation, URL validation and the shortener service."""
