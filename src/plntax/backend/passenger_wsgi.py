"""WSGI entrypoint for deploying the PLNTax backend behind Passenger."""

from plntax.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
