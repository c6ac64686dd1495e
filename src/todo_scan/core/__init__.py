"""Scan core: tag extraction, file scanning, tree walking and filtering."""
