"""Tests for provision_ai."""
