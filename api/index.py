# Serverless entrypoint: the host imports this module and looks for an ASGI callable named "app".

from weekend_vibes.gateway.app import create_app

app = create_app()

if __name__ == "__main__":
    # Optional: run locally for testing this entrypoint
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
