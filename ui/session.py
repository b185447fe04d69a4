import streamlit as st

from infrastructure.api import ApiClient, client_from_secrets


# One client per server process; secrets.toml holds API_BASE_URL / API_TOKEN
@st.cache_resource
def get_api_client() -> ApiClient:
    return client_from_secrets(st.secrets)
