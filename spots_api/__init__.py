"""Spots API — geolocated spot records served from Supabase/PostGIS."""
