"""Message catalogues for translatable error text.

This package contains JSON message files (en.json, fr.json) that are
read via importlib.resources. Keeping this as a real package ensures the
resources are discoverable both locally and when installed.
"""
