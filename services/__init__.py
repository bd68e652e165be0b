"""
services/ - Business Logic Layer
================================
Services validate input, orchestrate repositories and return typed records.
Each service receives the Database it works against at construction.
"""
