"""g-brief Letter Exporter - Services"""
