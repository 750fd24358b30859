import pytest
from fastapi.testclient import TestClient

from chat_relay.dependencies import get_conversation_store, get_generation_service, get_image_uploader
from chat_relay.main import app
from chat_relay.services.conversation_store import ConversationStore

SIGNED_URL = "https://storage.googleapis.com/test-bucket/0b6f.png?Expires=2057875200&Signature=abc"


class FakeGenerationService:
    def __init__(self, reply="  Hello! How can I help?  \n", image_url="https://images.example/img-1.png?st=x"):
        self.reply = reply
        self.image_url = image_url
        self.error = None
        self.chat_calls = []
        self.image_calls = []

    async def complete_chat(self, messages):
        self.chat_calls.append(messages)
        if self.error:
            raise self.error
        return self.reply.strip()

    async def generate_image(self, prompt):
        self.image_calls.append(prompt)
        if self.error:
            raise self.error
        return self.image_url


class FakeUploader:
    def __init__(self, signed_url=SIGNED_URL):
        self.signed_url = signed_url
        self.error = None
        self.uploaded = []

    async def upload(self, image_url):
        self.uploaded.append(image_url)
        if self.error:
            raise self.error
        return self.signed_url


class FakeDocument:
    def __init__(self, db, path):
        self.db = db
        self.path = path

    async def set(self, data):
        if self.db.error:
            raise self.db.error
        self.db.writes.append(self.path)
        self.db.docs[self.path] = data


class FakeCollection:
    def __init__(self, db, path):
        self.db = db
        self.path = path

    def document(self, doc_id):
        return FakeDocument(self.db, f"{self.path}/{doc_id}")


class FakeFirestore:
    """Minimal stand-in for the async Firestore client."""

    def __init__(self):
        self.docs = {}
        self.writes = []
        self.error = None

    def collection(self, path):
        return FakeCollection(self, path)


@pytest.fixture
def generation():
    return FakeGenerationService()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def firestore():
    return FakeFirestore()


@pytest.fixture
def client(generation, uploader, firestore):
    store = ConversationStore(firestore)
    app.dependency_overrides[get_generation_service] = lambda: generation
    app.dependency_overrides[get_image_uploader] = lambda: uploader
    app.dependency_overrides[get_conversation_store] = lambda: store
    # Not used as a context manager: the lifespan (real Firebase/OpenAI clients) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()
