"""
BioTerra Dashboard - Contact

Contact form.  Messages are logged; there is no delivery backend.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import logging

import streamlit as st

from bioterra.dashboard.styles import inject_css

logger = logging.getLogger(__name__)

inject_css()

st.markdown("## ✉️ Contact us")

with st.form("contact-form", clear_on_submit=True):
    name = st.text_input("Name")
    email = st.text_input("Email")
    message = st.text_area("Message")
    sent = st.form_submit_button("Send")

if sent:
    if not (name and email and message):
        st.warning("Please fill in every field.")
    else:
        logger.info(f"[Contact] Message from {name} <{email}> ({len(message)} chars)")
        st.success("Thanks! We will get back to you soon.")
