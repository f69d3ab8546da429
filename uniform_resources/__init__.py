"""Uniform resources: anchors in, filtered and transformed resources out."""
