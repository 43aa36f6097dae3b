"""
Web interface for the environmental risk portal.
"""
