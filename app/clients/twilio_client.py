from functools import lru_cache

from twilio.rest import Client


@lru_cache()
def get_twilio_client(account_sid: str, auth_token: str) -> Client:
    return Client(account_sid, auth_token)
