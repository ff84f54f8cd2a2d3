"""
Session timeout desktop host.
"""
