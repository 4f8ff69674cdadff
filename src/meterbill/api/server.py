"""Server module for running the API."""

import uvicorn


def run_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
    workers: int = 1,
) -> None:
    """Run the meterbill API server.

    Parameters
    ----------
    host : str, optional
        Host to bind to, by default "127.0.0.1"
    port : int, optional
        Port to bind to, by default 8000
    reload : bool, optional
        Enable auto-reload for development, by default False
    workers : int, optional
        Number of worker processes, by default 1; forced to 1 with reload
    """
    if reload:
        workers = 1
        print("Auto-reload enabled, running with 1 worker")

    print(f"Starting meterbill API server on http://{host}:{port}")
    print(f"API documentation: http://{host}:{port}/docs")

    uvicorn.run(
        "meterbill.api.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level="info",
    )
