"""
Album Service

Album collection microservice.
Handles album CRUD, (title, artist) uniqueness and score history.

Port: 3000
"""

__version__ = "1.0.0"
__service_name__ = "album_service"
__service_port__ = 3000
