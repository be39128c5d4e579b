"""Logging, validation and benchmarking helpers"""
