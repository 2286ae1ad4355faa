"""Shared fixtures for prisma-extractor tests."""

import asyncio
import logging

import pytest

from prisma_extractor.codegen.core.parser import parse_schema_text
from prisma_extractor.logging_config import ROOT_LOGGER_NAME

BLOG_SCHEMA = '''
datasource db {
  provider = "postgresql"
  url      = env("DATABASE_URL")
}

generator client {
  provider = "prisma-client-js"
}

/// Access level of a user
enum Role {
  ADMIN
  USER
}

model User {
  /// Primary key
  id        Int      @id @default(autoincrement())
  email     String   @unique
  name      String?
  role      Role     @default(USER)
  posts     Post[]
  createdAt DateTime @default(now())
}

model Post {
  id       Int     @id @default(autoincrement())
  title    String  @db.VarChar(255)
  tags     String[]
  author   User    @relation("PostAuthor", fields: [authorId], references: [id])
  authorId Int

  @@index([authorId])
}
'''

ROLE_USER_SCHEMA = '''
enum Role {
  ADMIN
  USER
}

model User {
  id    Int    @id
  email String
  role  Role
}
'''


def parse(text):
    """Parse schema text synchronously."""
    return asyncio.run(parse_schema_text(text))


@pytest.fixture
def blog_schema_text():
    return BLOG_SCHEMA


@pytest.fixture
def blog_model():
    return parse(BLOG_SCHEMA)


@pytest.fixture
def role_user_model():
    return parse(ROLE_USER_SCHEMA)


@pytest.fixture
def schema_file(tmp_path):
    """Blog schema written to ``prisma/schema.prisma`` under tmp_path."""
    path = tmp_path / "prisma" / "schema.prisma"
    path.parent.mkdir(parents=True)
    path.write_text(BLOG_SCHEMA, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so they don't outlive captured streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
