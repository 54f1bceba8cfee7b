"""PharmaHub API: industries, PBMs, products, pharmacies and users."""
