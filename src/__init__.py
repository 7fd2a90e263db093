"""
Retail Sales Dashboard
"""
