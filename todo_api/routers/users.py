import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from todo_api.schemas.user import UserCreate, UserLogin, UserOut
from todo_api.models import user as users
from todo_api.utils.auth import Identity, authenticate, hash_password, verify_password, issue_token
from todo_api.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut)
def signup(user: UserCreate, response: Response, db: Database = Depends(get_db)):
    exists = users.find_by_email(db, user.email)
    if exists:
        raise HTTPException(status_code=400, detail="Email already exists")

    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise HTTPException(status_code=400, detail=str(e))

    new_user = users.new_user(user.email, hashed)
    try:
        new_user["_id"] = db.users.insert_one(new_user).inserted_id
        token = issue_token(db, new_user["_id"])
    except DuplicateKeyError:
        # lost a race with a concurrent signup for the same email
        raise HTTPException(status_code=400, detail="Email already exists")
    except PyMongoError as e:
        logger.warning("Could not create user: %s", e)
        raise HTTPException(status_code=400, detail="Could not create user")

    logger.info("Signed up user %s", new_user["_id"])
    response.headers["x-auth"] = token
    return users.to_public(new_user)


@router.post("/login", response_model=UserOut)
def login(user: UserLogin, response: Response, db: Database = Depends(get_db)):
    db_user = users.find_by_email(db, user.email)
    if not db_user or not verify_password(user.password, db_user["password"]):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    try:
        token = issue_token(db, db_user["_id"])
    except PyMongoError as e:
        logger.warning("Could not issue token for user %s: %s", db_user["_id"], e)
        raise HTTPException(status_code=400, detail="Could not log in")

    logger.info("User %s logged in", db_user["_id"])
    response.headers["x-auth"] = token
    return users.to_public(db_user)


@router.get("/me", response_model=UserOut)
def me(identity: Identity = Depends(authenticate)):
    return users.to_public(identity.user)


@router.delete("/me/token")
def logout(db: Database = Depends(get_db), identity: Identity = Depends(authenticate)):
    try:
        users.pull_token(db, identity.user["_id"], identity.token)
    except PyMongoError as e:
        logger.warning("Could not remove token for user %s: %s", identity.user["_id"], e)
        raise HTTPException(status_code=400, detail="Could not log out")
    logger.info("User %s logged out", identity.user["_id"])
    return Response(status_code=200)
