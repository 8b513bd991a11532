"""
Authentication package for the Flask app.

This package implements GitHub sign-in (OAuth2 Authorization Code Flow) and
keeps the signed-in identity in the server-side session.
"""
