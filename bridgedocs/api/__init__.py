"""Editor routes, access gate views and HTML templates."""
