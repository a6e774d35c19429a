# run_dev.py
import os
import sys
import socket


# Carga .env si existe (SECRET_KEY, DATABASE_URL, ...)
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv(".env")


def _lan_ip() -> str:
    """Obtiene IP LAN real sin depender de hostname/DNS."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def main():
    import uvicorn

    if not os.getenv("SECRET_KEY"):
        print("❌ Falta SECRET_KEY (env o .env).")
        sys.exit(1)

    spec = os.getenv("APP_MODULE", "app.main:app")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    reload_env = os.getenv("RELOAD", "1")
    reload_flag = reload_env.strip() in ("1", "true", "True", "yes", "on")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        spec,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["app"],
        timeout_keep_alive=30,
        timeout_graceful_shutdown=15,
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
