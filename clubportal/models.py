from werkzeug.security import generate_password_hash, check_password_hash

from database import db
from clubportal.utils import utcnow, new_document_id


class DocumentMixin:
    """Shared shape for records exposed through the DocumentClient.

    FIELDS lists the attributes a caller may write; everything else
    (ids, timestamps) is owned by the store.
    """
    ID_FIELD = 'id'
    FIELDS = ()

    def to_dict(self):
        data = {self.ID_FIELD: getattr(self, self.ID_FIELD)}
        for field in self.FIELDS:
            data[field] = getattr(self, field)
        if hasattr(self, 'created_at'):
            data['created_at'] = self.created_at
        return data


class Account(db.Model):
    """Identity-provider account. Only the IdentityClient touches this table."""
    __tablename__ = 'account'
    uid = db.Column(db.String(64), primary_key=True, default=new_document_id)
    email = db.Column(db.String(120), index=True, unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    last_sign_in_at = db.Column(db.DateTime, nullable=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if self.password_hash is None:
            return False
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<Account {self.email}>'


class User(DocumentMixin, db.Model):
    __tablename__ = 'users'
    ID_FIELD = 'uid'
    FIELDS = ('email', 'username', 'role', 'created_by')

    uid = db.Column(db.String(64), primary_key=True)
    email = db.Column(db.String(120), index=True, nullable=False)
    username = db.Column(db.String(80), index=True, unique=True, nullable=False)
    role = db.Column(db.String(20), index=True, nullable=False)
    created_by = db.Column(db.String(64), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'


class Project(DocumentMixin, db.Model):
    __tablename__ = 'projects'
    FIELDS = ('title', 'category', 'image', 'year', 'summary')

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    title = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(64), nullable=False)
    image = db.Column(db.String(500), nullable=False, default='')
    year = db.Column(db.String(4), nullable=False)
    summary = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<Project {self.title}>'


class Event(DocumentMixin, db.Model):
    __tablename__ = 'events'
    FIELDS = ('title', 'date', 'image', 'location', 'description')

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    title = db.Column(db.String(200), nullable=False)
    date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    image = db.Column(db.String(500), nullable=False, default='')
    location = db.Column(db.String(255), nullable=False, default='')
    description = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<Event {self.title} - {self.date}>'


class Testimonial(DocumentMixin, db.Model):
    __tablename__ = 'testimonials'
    FIELDS = ('name', 'role', 'quote', 'avatar')

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    name = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(128), nullable=False, default='')
    quote = db.Column(db.Text, nullable=False)
    avatar = db.Column(db.String(500), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class BlogPost(DocumentMixin, db.Model):
    __tablename__ = 'blog_posts'
    FIELDS = ('title', 'content', 'image', 'author')

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(500), nullable=False, default='')
    author = db.Column(db.String(128), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class GalleryImage(DocumentMixin, db.Model):
    __tablename__ = 'gallery'
    FIELDS = ('url', 'caption', 'category')

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    url = db.Column(db.String(500), nullable=False)
    caption = db.Column(db.String(255), nullable=False, default='')
    category = db.Column(db.String(64), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class SiteSettings(DocumentMixin, db.Model):
    __tablename__ = 'site_settings'
    FIELDS = (
        'president_name', 'president_image', 'president_title',
        'president_bio', 'president_facebook', 'president_email',
        'vice_president_name', 'vice_president_image', 'vice_president_title',
        'vice_president_bio', 'vice_president_facebook', 'vice_president_email',
        'about_us_title', 'about_us_content', 'updated_at',
    )

    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    president_name = db.Column(db.String(128), default='')
    president_image = db.Column(db.String(500), default='')
    president_title = db.Column(db.String(128), default='President')
    president_bio = db.Column(db.Text, default='')
    president_facebook = db.Column(db.String(500), default='')
    president_email = db.Column(db.String(120), default='')
    vice_president_name = db.Column(db.String(128), default='')
    vice_president_image = db.Column(db.String(500), default='')
    vice_president_title = db.Column(db.String(128), default='Vice President')
    vice_president_bio = db.Column(db.Text, default='')
    vice_president_facebook = db.Column(db.String(500), default='')
    vice_president_email = db.Column(db.String(120), default='')
    about_us_title = db.Column(db.String(200), default='')
    about_us_content = db.Column(db.Text, default='')
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class ApiToken(db.Model):
    __tablename__ = 'api_token'
    token = db.Column(db.String(128), primary_key=True)
    uid = db.Column(db.String(64), index=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)

    def is_expired(self, now=None):
        return (now or utcnow()) >= self.expires_at

    def __repr__(self):
        return f'<ApiToken {self.uid}>'
