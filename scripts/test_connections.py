#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the database, MongoDB and (optional) LLM connections.
Usage: python scripts/test_connections.py
"""
from jobportal.core.config import get_settings
from jobportal.db.database import test_db_connection
from jobportal.db.mongodb import test_mongo_connection
from jobportal.services.ai_client import get_chat_client, llm_enabled


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAMPUS JOB PORTAL - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing relational database...")
    url = settings.sqlalchemy_url
    if settings.postgres_password and settings.postgres_password in url:
        url = url.replace(settings.postgres_password, "****")
    print(f"    URL: {url}")
    if test_db_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    print("\n[2] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n[3] Testing LLM chat endpoint...")
    if llm_enabled():
        print(f"    Base URL: {settings.ai_base_url}  Model: {settings.ai_model}")
        if get_chat_client().test_connection():
            print("    ✅ LLM: CONNECTED")
        else:
            print("    ❌ LLM: FAILED")
    else:
        print(f"    ⚠️  AI_MODE={settings.ai_mode}, chat uses mock answers (skipped)")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
