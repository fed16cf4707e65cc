"""
Streamlit UI for the Movie Finder.
Calls the FastAPI server (default http://localhost:8000) for trending terms and
movie listings. Streamlit reruns the script when the search box is committed,
so no client-side debouncing is needed here.

Run API:  uvicorn api:app --reload
Run UI:   streamlit run streamlit_app.py
"""

# HTTP client to call the API
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Default URL where the FastAPI server is expected to run locally
DEFAULT_API_URL = "http://localhost:8000"  # default API base URL
CARDS_PER_ROW = 4  # grid width for movie cards

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Finder", layout="wide")  # wide layout

# Main page title
st.title("Find Movies You'll Enjoy Without the Hassle")  # friendly header

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", DEFAULT_API_URL)  # where the API lives

# Search box; an empty value lists popular movies
query = st.text_input("Search", placeholder="Search through thousands of movies", key="query")

# Trending section, shown only when the store returned something
try:
	t = requests.get(f"{api_url}/trending", timeout=10)
	t.raise_for_status()
	trending_items = t.json()
except requests.RequestException:
	trending_items = []  # trending is optional; stay silent

if trending_items:
	st.subheader("Trending Movies")
	cols = st.columns(len(trending_items))
	for col, item in zip(cols, trending_items):
		with col:
			st.caption(f"#{item['rank']}")
			st.image(item['poster_url'], caption=item['term'])

def fetch_movies(base_url: str, search: str):
	"""Return (error_message, results) for one /movies call."""
	try:
		resp = requests.get(f"{base_url}/movies", params={"query": search}, timeout=30)
		if resp.status_code == 502:
			return resp.json().get("detail", "Failed to fetch movies"), []  # catalog message
		resp.raise_for_status()  # other error codes
		return "", resp.json().get("results", [])
	except requests.RequestException as e:  # network/API errors
		return f"API request failed: {e}", []


# All movies section: spinner while loading, error text on failure, cards otherwise
st.subheader("All Movies")
search = query.strip()
# Reruns with an unchanged query reuse the last listing, so each search is counted once
if "listing" not in st.session_state or st.session_state.get("last_query") != search:
	with st.spinner("Loading movies..."):
		error_message, results = fetch_movies(api_url, search)
	st.session_state["listing"] = (error_message, results)
	# a failed request is retried on the next rerun
	st.session_state["last_query"] = None if error_message else search
error_message, results = st.session_state["listing"]

if error_message:
	st.error(error_message)
else:
	for start in range(0, len(results), CARDS_PER_ROW):
		row = st.columns(CARDS_PER_ROW)
		for col, movie in zip(row, results[start:start + CARDS_PER_ROW]):
			with col:
				if movie['poster_url'].startswith("http"):
					st.image(movie['poster_url'])  # poster
				st.markdown(f"**{movie['title']}**")  # title
				st.caption(f"⭐ {movie['rating']} • {movie['original_language']} • {movie['year']}")  # card details
