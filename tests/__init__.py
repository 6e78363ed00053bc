"""Test suite for hubfirmware."""
