"""Kernel – error taxonomy and value types shared by every layer."""
