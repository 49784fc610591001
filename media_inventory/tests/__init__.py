"""Tests for the Media Inventory Tool."""
