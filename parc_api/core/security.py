from passlib.context import CryptContext
import jwt

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_ALGORITHM = "HS256"


def hash_password(pw: str) -> str:
    return pwd_context.hash(pw)


def verify_password(pw: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(pw, hashed)
    except ValueError:
        return False


def sign_session_id(sid: str, secret: str) -> str:
    return jwt.encode({"sid": sid}, secret, algorithm=SESSION_TOKEN_ALGORITHM)


def unsign_session_id(token: str, secret: str) -> str | None:
    try:
        payload = jwt.decode(token, secret, algorithms=[SESSION_TOKEN_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    sid = payload.get("sid")
    return str(sid) if sid else None
