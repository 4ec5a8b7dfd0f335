"""cago - temporary AWS credentials from a SAML identity provider."""

__version__ = "1.1.0"
