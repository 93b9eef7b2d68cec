"""
services/ - Business Logic Layer
================================
Services validate input, call repositories and raise domain errors.
They know nothing about HTTP.
"""
