"""
Basic usage - Connect and list certificate authorities
"""
from tinycert import APIConfig, Session


def main():
    # Credentials from TINYCERT_EMAIL, TINYCERT_PASSWORD and TINYCERT_APIKEY
    config = APIConfig.from_env()

    with Session(config) as session:
        for item in session.ca.list():
            info = session.ca.details(item.id)
            print(f"{item.id}: {item.name} ({info.hash_algorithm})")


if __name__ == "__main__":
    main()
