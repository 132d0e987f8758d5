# ABOUTME: skycast package: city geocoding, weather and air-quality aggregation for a weather front-end.
# ABOUTME: See weather_service for fetching, interpreters for classifications and web for the ASGI app.
