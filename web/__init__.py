"""
Web interface for CPU Scheduling Simulator
"""
