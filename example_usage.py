# example_usage.py - Complete usage examples
#
# Expects a todo server on http://localhost:3000 serving /todos with the
# fields Id, Title and IsCompleted.

import logging
from dataclasses import dataclass

from restlib import Client, ContentType, HTTPError, Model

@dataclass
class Todo(Model):
    Id: int = 0
    Title: str = ""
    IsCompleted: bool = False

    def model_id(self) -> str:
        return str(self.Id)

    def root_url(self) -> str:
        return "/todos"

def example_crud(client: Client):
    """Create, read, update and delete one todo"""
    todo = Todo(Title="Discover the meaning of life", IsCompleted=False)
    client.create(todo)
    print(f"✅ Created todo: {todo}")

    fetched = Todo()
    client.read(todo.model_id(), fetched)
    print(f"✅ Read todo: {fetched}")

    todo.IsCompleted = True
    client.update(todo)
    print(f"✅ Updated todo: {todo}")

    client.delete(todo)
    print(f"✅ Deleted todo {todo.model_id()}")

def example_read_all(client: Client):
    """Fetch every todo into a list"""
    todos = []
    client.read_all(todos, Todo)
    print(f"✅ Read {len(todos)} todos")
    for todo in todos:
        print(f"   {todo.Id}: {todo.Title} ({'done' if todo.IsCompleted else 'open'})")

def example_error_handling(client: Client):
    """Non-2xx responses carry the url, status code and raw body"""
    try:
        client.read("9999", Todo())
    except HTTPError as e:
        print(f"❌ {e}")
        print(f"   body: {e.body.decode('utf-8', errors='replace')}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    for content_type in (ContentType.URL_ENCODED, ContentType.JSON):
        print(f"\n🔧 Using {content_type.value}")
        client = Client({"base_url": "http://localhost:3000", "content_type": content_type})
        example_read_all(client)
        example_crud(client)
        example_error_handling(client)
