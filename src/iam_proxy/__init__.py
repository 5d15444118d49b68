"""IAM proxy: exchanges client credentials for signed access and identity tokens."""

__version__ = "1.0.0"
