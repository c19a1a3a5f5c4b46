"""Local development entry point.

Usage:
    python run.py

Reads .env (RESEND_API_KEY, TO_EMAIL, ...) before the app is created so the
config classes see the values.
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load .env before anything else

from inquiry_relay import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=int(os.environ.get("PORT", 5001)))
