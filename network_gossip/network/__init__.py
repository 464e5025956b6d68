"""
Network graph model and topology construction.
"""
