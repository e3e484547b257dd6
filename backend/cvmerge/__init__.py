"""Merge engine reconciling extracted CV data with stored candidate profiles."""
