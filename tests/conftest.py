import pytest
from fastapi.testclient import TestClient

from clipshare.apigateway import build_container, create_app
from clipshare.apigateway.settings import GatewaySettings
from clipshare.authservice import AuthConfig, AuthService, InMemoryUserStore, JWTTokenIssuer, PasswordHasher
from clipshare.mediaservice import LocalFSMediaHost, MediaSettings


class FakeClock:
    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def now_utc_ts(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_cfg():
    # lowest bcrypt cost keeps the suite fast
    return AuthConfig(JWT_SECRET="test-secret", BCRYPT_ROUNDS=4)


@pytest.fixture
def make_auth(clock, auth_cfg):
    def _make(store=None, cfg=None):
        cfg = cfg or auth_cfg
        store = store if store is not None else InMemoryUserStore()
        issuer = JWTTokenIssuer(
            cfg.JWT_SECRET,
            ttl_seconds=cfg.TOKEN_TTL_SECONDS,
            issuer=cfg.AUTH_ISSUER,
            audience=cfg.AUTH_AUDIENCE,
            clock=clock,
        )
        svc = AuthService(user_store=store, hasher=PasswordHasher(rounds=cfg.BCRYPT_ROUNDS), issuer=issuer, cfg=cfg)
        return svc, store
    return _make


@pytest.fixture
def container(tmp_path, auth_cfg):
    media_cfg = MediaSettings(MEDIA_LOCAL_ROOT=str(tmp_path / "media"), MAX_UPLOAD_BYTES=1024)
    c = build_container(
        GatewaySettings(STORE_BACKEND="memory"),
        auth_cfg,
        media_cfg,
        media_host=LocalFSMediaHost(str(tmp_path / "media"), public_base_url="http://media.test"),
    )
    yield c
    c.close()


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as c:
        yield c
