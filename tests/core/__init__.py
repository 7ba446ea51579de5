"""Tests for binary loading and location evaluation."""
