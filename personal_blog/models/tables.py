# personal_blog/models/tables.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Category(Base):
    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    code = Column(String(255), nullable=False, unique=True)
    description = Column(Text)
    icon_name = Column(String(255))
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True))

    posts = relationship("Post", back_populates="category")

    __table_args__ = (
        Index('idx_categories_name', 'name'),
    )


class Post(Base):
    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    content = Column(Text)
    author = Column(String(255))
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True))
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False)

    category = relationship("Category", back_populates="posts")
    metadata_entries = relationship("PostMetadata", back_populates="post")

    __table_args__ = (
        Index('idx_posts_category_id', 'category_id'),
        Index('idx_posts_created_at', 'created_at'),
    )


class PostMetadata(Base):
    """Key/value pairs attached to a post."""
    __tablename__ = 'post_metadata'

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey('posts.id'), nullable=False)
    key_name = Column(String(255), nullable=False)
    value = Column(Text)

    post = relationship("Post", back_populates="metadata_entries")


class RecentPost(Base):
    __tablename__ = 'recent_posts'

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey('posts.id'), nullable=False, unique=True)

    post = relationship("Post")
