import uvicorn

from restaurant_api.utils.config import settings


def main() -> None:
    uvicorn.run("restaurant_api.main:create_app", factory=True, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
