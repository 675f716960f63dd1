"""Firmware domain: downloading images and flashing them to devices."""
