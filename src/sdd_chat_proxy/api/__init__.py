"""
Couche HTTP (FastAPI).
"""
