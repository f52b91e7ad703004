"""
HTTP Controllers Package

Contains the Flask blueprints.
"""
