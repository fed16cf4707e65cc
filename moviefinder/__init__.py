"""
Movie Finder - core package

This package contains the non-presentational logic of the movie browser:
- models: movies, search analytics records and UI state
- catalog: movie catalog (TMDB) client
- document_store / analytics: search counting and trending terms
- debounce / controller: debounced search input and state transitions
- config: settings, logging and client construction
- tui: terminal front end
"""
