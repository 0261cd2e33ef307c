from dotenv import load_dotenv
import os

import uvicorn

load_dotenv()


if __name__ == "__main__":
    # Serve the back-office API; APP_ENV selects config.yaml / config_dev.yaml / config_test.yaml
    uvicorn.run(
        "admin_loja.api:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("APP_ENV") == "dev",
    )
