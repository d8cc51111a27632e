"""Driving-direction enrichment for journey maps."""
