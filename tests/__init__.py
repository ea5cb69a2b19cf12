"""Test package for atpdata."""
