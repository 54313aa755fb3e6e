"""
Utility helpers for the Tibber Refiner.
"""
