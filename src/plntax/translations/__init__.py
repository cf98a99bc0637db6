"""JSON translation catalogues shared by the backend and front-end."""
