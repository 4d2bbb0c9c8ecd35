"""
                Digital Menu

Backend for restaurant digital menus: email one-time-code login,
owner-scoped management of restaurants, categories and dishes, and a
public, unauthenticated menu read for diners scanning a QR code.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
