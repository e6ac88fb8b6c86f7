from statusmake.api.health_routes import ErrorSink, get_route_handler, setup_endpoints

__all__ = ["ErrorSink", "get_route_handler", "setup_endpoints"]
