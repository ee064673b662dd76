"""A Streamlit web frontend for the Clima API."""

import streamlit as st
import requests

# --- Page and API Configuration ---
st.set_page_config(page_title="Clima", page_icon="🌤️", layout="centered")
API_BASE = "http://localhost:8000"

ICON_EMOJI = {
    "tstorm1": "⛈️",
    "tstorm3": "🌩️",
    "light_rain": "🌦️",
    "shower3": "🌧️",
    "snow4": "🌨️",
    "snow5": "❄️",
    "fog": "🌫️",
    "sunny": "☀️",
    "cloudy2": "☁️",
    "dunno": "❓",
}


def get_api_session():
    """Gets the requests.Session object from streamlit's session state."""
    if "api_session" not in st.session_state:
        st.session_state.api_session = requests.Session()
    return st.session_state.api_session


def call_api(method: str, path: str, **kwargs):
    """Calls the API and stores the returned weather state."""
    try:
        response = get_api_session().request(
            method, f"{API_BASE}{path}", timeout=15, **kwargs
        )
    except requests.exceptions.ConnectionError:
        st.session_state.weather_state = {
            "success": False,
            "message": "Connection Issues",
        }
        return
    if response.status_code == 200:
        st.session_state.weather_state = response.json()
    else:
        st.error(f"Error: {response.status_code} - {response.text}")


# --- Main App ---
st.title("🌤️ Clima")

if "weather_state" not in st.session_state:
    call_api("GET", "/weather/current")

state = st.session_state.get("weather_state") or {}
data = state.get("data")

# --- Current Weather ---
with st.container(border=True):
    if data:
        icon_col, temp_col = st.columns([1, 2])
        icon_col.markdown(f"# {ICON_EMOJI.get(data['icon'], '❓')}")
        temp_col.markdown(f"# {data['temperature_text']}")
        st.subheader(data["city"] or "Unknown location")
    else:
        st.subheader(state.get("message", "Waiting for location"))

    unit = state.get("unit", "fahrenheit")
    next_unit = "Celsius" if unit == "fahrenheit" else "Fahrenheit"
    if st.button(f"Switch to {next_unit}"):
        call_api("POST", "/weather/unit/toggle")
        st.rerun()

# --- Change City ---
with st.container(border=True):
    st.subheader("Change City")
    city = st.text_input("City name", placeholder="e.g., Paris")
    if st.button("Get Weather", disabled=not city):
        with st.spinner(f"Getting weather for {city}..."):
            call_api("POST", "/weather/city", json={"city": city})
        st.rerun()

# --- Location ---
with st.container(border=True):
    st.subheader("Use a Location")
    lat_col, lon_col = st.columns(2)
    latitude = lat_col.number_input("Latitude", -90.0, 90.0, 48.8566, format="%.4f")
    longitude = lon_col.number_input(
        "Longitude", -180.0, 180.0, 2.3522, format="%.4f"
    )
    if st.button("Send Location"):
        with st.spinner("Looking up weather for your location..."):
            # Re-arm first so a repeated click triggers a new lookup
            call_api("POST", "/weather/location/reset")
            call_api(
                "POST",
                "/weather/location",
                json={"latitude": latitude, "longitude": longitude, "accuracy": 100.0},
            )
        st.rerun()
