#!/usr/bin/env python3
import os
import logging

import uvicorn


def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8765))
    reload = os.getenv("UVICORN_RELOAD", "False").lower() == "true"

    logging.info(f"🚀 Démarrage du serveur MoodTune sur {host}:{port}")
    uvicorn.run("moodtune.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
