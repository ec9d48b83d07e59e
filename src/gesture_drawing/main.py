"""Command-line entrypoint that serves the API with uvicorn."""

import os

import uvicorn


def main() -> None:
    """Run the gesture drawing API."""
    uvicorn.run(
        "gesture_drawing.api.asgi:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
