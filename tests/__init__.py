"""Test suite for ListingBridge."""
