"""OSHA injury & illness logbook.

Record schema and validation (Forms 300/301/300A), OSHA submission CSV
export, dashboard metrics, pluggable record stores and a Flask JSON API.
"""
