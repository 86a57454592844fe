# firebase_setup.py
import json
import logging
import os

import firebase_admin
import streamlit as st
from firebase_admin import credentials, db
from streamlit.errors import StreamlitAPIException

logger = logging.getLogger(__name__)

CREDS_FILE = "firebase_creds.json"
DATABASE_URL_ENV = "FIREBASE_DATABASE_URL"


def _secret(key):
    try:
        return st.secrets[key] if key in st.secrets else None
    except (FileNotFoundError, StreamlitAPIException):
        # no secrets.toml at all
        return None


def load_credentials_dict():
    """Service-account dict from Streamlit secrets, else the local JSON file."""
    creds = _secret("firebase_credentials")
    if creds is not None:
        creds_dict = dict(creds)
    elif os.path.exists(CREDS_FILE):
        with open(CREDS_FILE) as f:
            creds_dict = json.load(f)
    else:
        return None
    # secrets store the key with escaped newlines
    if "private_key" in creds_dict:
        creds_dict["private_key"] = creds_dict["private_key"].replace("\\n", "\n")
    return creds_dict


def database_url():
    return _secret("firebase_database_url") or os.environ.get(DATABASE_URL_ENV)


def missing_config():
    missing = []
    if load_credentials_dict() is None:
        missing.append("firebase_credentials")
    if not database_url():
        missing.append("firebase_database_url")
    return missing


@st.cache_resource
def init_firebase():
    """Root Realtime Database reference, or None when running offline."""
    missing = missing_config()
    if missing:
        logger.warning("Firebase not configured, missing: %s", ", ".join(missing))
        return None
    try:
        if not firebase_admin._apps:
            cred = credentials.Certificate(load_credentials_dict())
            firebase_admin.initialize_app(cred, {"databaseURL": database_url()})
            logger.info("Firebase app initialised for %s", database_url())
        return db.reference("/")
    except Exception as e:
        logger.error("Firebase initialization failed: %s", e)
        st.error(f"Firebase initialization failed, the board runs offline. ({e})")
        return None
