"""
BioTerra Dashboard - Login

Placeholder sign-in form.  There is no account backend; submitting only
acknowledges the attempt.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import logging

import streamlit as st

from bioterra.dashboard.styles import inject_css

logger = logging.getLogger(__name__)

inject_css()

st.markdown("## 🔐 Sign in")

with st.form("login-form"):
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")
    submitted = st.form_submit_button("Sign in")

if submitted:
    if not email or not password:
        st.warning("Enter both an email and a password.")
    else:
        logger.info(f"[Login] Sign-in attempted for {email}")
        st.info("Accounts are not available yet. All dashboards are open to visitors.")
