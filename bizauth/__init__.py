"""Authentication and authorization core of a multitenant business backend."""
