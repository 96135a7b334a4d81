"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_boto3_session, moto_session):
        # mock_boto3_session: MagicMock 세션 (get_client 패치와 함께 사용)
        # moto_session: moto로 모킹된 실제 boto3 Session
        pass
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import moto
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

TEST_REGION = "ap-southeast-2"
TEST_BUCKET = "unused-secrets-bucket"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", TEST_REGION)
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    mock_session = MagicMock()
    mock_session.client.return_value = MagicMock()
    mock_session.region_name = TEST_REGION
    return mock_session


@pytest.fixture
def mock_sm_client():
    """Secrets Manager 클라이언트 모킹 (페이지는 테스트에서 설정)"""
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = []
    client.get_paginator.return_value = paginator
    return client


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials():
    """moto 사용 시 AWS 자격 증명 설정"""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = TEST_REGION


@pytest.fixture
def moto_session(aws_credentials):
    """moto로 모킹된 boto3 Session (보고서 버킷 생성 포함)"""
    with moto.mock_aws():
        import boto3

        session = boto3.Session(region_name=TEST_REGION)
        session.client("s3").create_bucket(
            Bucket=TEST_BUCKET,
            CreateBucketConfiguration={"LocationConstraint": TEST_REGION},
        )
        yield session


@pytest.fixture
def report_bucket():
    """moto_session에 생성된 보고서 버킷 이름"""
    return TEST_BUCKET
