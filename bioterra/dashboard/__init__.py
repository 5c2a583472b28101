"""
BioTerra Streamlit dashboard.

Page scripts live in ``pages/`` and are registered by the root
``dashboard.py``; the modules here are the helpers they share.
"""
