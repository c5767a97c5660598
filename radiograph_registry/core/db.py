from __future__ import annotations

from pymongo import MongoClient
from pymongo.collection import Collection

from radiograph_registry.core.config import Settings


def create_client(settings: Settings) -> MongoClient:
    """MongoDB 클라이언트 생성

    연결 자체는 지연되며 첫 명령(ping) 시점에 확인된다.

    Args:
        settings: 애플리케이션 설정

    Returns:
        MongoDB 클라이언트
    """
    return MongoClient(
        settings.mongodb_uri,
        retryWrites=True,
        w="majority",
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
    )


def patient_collection(client: MongoClient, settings: Settings) -> Collection:
    """환자 컬렉션 핸들 반환

    Args:
        client: MongoDB 클라이언트
        settings: 애플리케이션 설정

    Returns:
        환자 컬렉션
    """
    return client[settings.mongodb_database][settings.mongodb_collection]
