"""Exploratory analysis of bioretention site condition assessments."""

__version__ = "0.1.0"
