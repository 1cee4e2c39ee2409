"""Headshot selection and URL resolution."""
