"""Rider route contributions: photo uploads and admin notification."""
