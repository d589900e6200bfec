"""Animated roller coaster ride along a closed cubic B-spline track."""
