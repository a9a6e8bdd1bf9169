"""Optional FastAPI adapter exposing a Health instance over HTTP."""
