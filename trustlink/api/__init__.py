"""HTTP surface shared by the profile, feed and connections services."""
