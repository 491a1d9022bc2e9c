"""Authentication building blocks: errors, bearer parsing, password rules, request models, client metadata, rate limiting, request logging and a live post hub."""

__version__ = "0.1.0"