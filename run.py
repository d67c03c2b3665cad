import os

from bookshelf import create_app
from bookshelf.config import DevConfig

app = create_app(DevConfig)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    debug = os.getenv("DEBUG", "true").strip().lower() in {"1", "true", "yes", "on"}
    # One thread per request; writes are still serialized by the store
    app.run(host=host, port=port, debug=debug, threaded=True)
