import re
from datetime import date

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, DateField, URLField, EmailField, SubmitField
from wtforms.validators import DataRequired, Optional, Length, Regexp, URL, Email

# http(s) only; URL() alone accepts any scheme
WEB_LINK = Regexp(r'^https?://', flags=re.IGNORECASE, message='Links must start with http:// or https://.')


class DocumentForm(FlaskForm):
    """A form whose fields map one-to-one onto a document's FIELDS."""

    document_fields = ()

    @classmethod
    def from_document(cls, document, **kwargs):
        return cls(data=document, **kwargs)

    def to_document(self):
        return {name: self[name].data for name in self.document_fields}


class ProjectForm(DocumentForm):
    document_fields = ('title', 'category', 'image', 'year', 'summary')

    title = StringField('Project Title', validators=[DataRequired(), Length(max=200)])
    category = SelectField('Category', validators=[DataRequired()])
    image = URLField('Image URL', validators=[DataRequired(), URL(), WEB_LINK])
    year = StringField('Year', validators=[DataRequired(), Regexp(r'^\d{4}$', message='Year must be four digits.')])
    summary = TextAreaField('Summary', validators=[DataRequired()])
    submit = SubmitField('Save Project')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.category.choices = [('', 'Select Category')] + [
            (category, category) for category in current_app.config['PROJECT_CATEGORIES']
        ]


class EventForm(DocumentForm):
    document_fields = ('title', 'date', 'image', 'location', 'description')

    title = StringField('Event Title', validators=[DataRequired(), Length(max=200)])
    date = DateField('Event Date', format='%Y-%m-%d', validators=[DataRequired()])
    image = URLField('Image URL', validators=[DataRequired(), URL(), WEB_LINK])
    location = StringField('Location', validators=[DataRequired(), Length(max=255)])
    description = TextAreaField('Event Description', validators=[DataRequired()])
    submit = SubmitField('Save Event')

    @classmethod
    def from_document(cls, document, **kwargs):
        data = dict(document)
        try:
            data['date'] = date.fromisoformat(data.get('date') or '')
        except ValueError:
            data['date'] = None
        return cls(data=data, **kwargs)

    def to_document(self):
        document = super().to_document()
        document['date'] = self.date.data.isoformat()
        return document


class TestimonialForm(DocumentForm):
    document_fields = ('name', 'role', 'quote', 'avatar')

    name = StringField('Name', validators=[DataRequired(), Length(max=128)])
    role = StringField('Role', validators=[Optional(), Length(max=128)])
    quote = TextAreaField('Quote', validators=[DataRequired()])
    avatar = URLField('Avatar URL', validators=[Optional(), URL(), WEB_LINK])
    submit = SubmitField('Save Testimonial')


class BlogPostForm(DocumentForm):
    document_fields = ('title', 'content', 'image', 'author')

    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    content = TextAreaField('Content', validators=[DataRequired()])
    image = URLField('Image URL', validators=[Optional(), URL(), WEB_LINK])
    author = StringField('Author', validators=[Optional(), Length(max=128)])
    submit = SubmitField('Save Post')


class GalleryImageForm(DocumentForm):
    document_fields = ('url', 'caption', 'category')

    url = URLField('Image URL', validators=[DataRequired(), URL(), WEB_LINK])
    caption = StringField('Caption', validators=[Optional(), Length(max=255)])
    category = StringField('Category', validators=[Optional(), Length(max=64)])
    submit = SubmitField('Save Image')


class SiteSettingsForm(DocumentForm):
    document_fields = (
        'president_name', 'president_image', 'president_title',
        'president_bio', 'president_facebook', 'president_email',
        'vice_president_name', 'vice_president_image', 'vice_president_title',
        'vice_president_bio', 'vice_president_facebook', 'vice_president_email',
        'about_us_title', 'about_us_content',
    )

    president_name = StringField('President Name', validators=[DataRequired(), Length(max=128)])
    president_image = StringField('President Image URL', validators=[DataRequired(), Length(max=500), WEB_LINK])
    president_title = StringField('Title', validators=[Optional(), Length(max=128)])
    president_bio = TextAreaField('Short bio', validators=[Optional()])
    president_facebook = URLField('Facebook Profile URL', validators=[Optional(), URL(), WEB_LINK])
    president_email = EmailField('Email Address', validators=[Optional(), Email()])

    vice_president_name = StringField('Vice President Name', validators=[DataRequired(), Length(max=128)])
    vice_president_image = StringField('Vice President Image URL', validators=[DataRequired(), Length(max=500), WEB_LINK])
    vice_president_title = StringField('Title', validators=[Optional(), Length(max=128)])
    vice_president_bio = TextAreaField('Short bio', validators=[Optional()])
    vice_president_facebook = URLField('Facebook Profile URL', validators=[Optional(), URL(), WEB_LINK])
    vice_president_email = EmailField('Email Address', validators=[Optional(), Email()])

    about_us_title = StringField('About Us Title', validators=[DataRequired(), Length(max=200)])
    about_us_content = TextAreaField('About Us Content', validators=[DataRequired()])
    submit = SubmitField('Save Settings')

    def to_document(self):
        return {name: (self[name].data or '') for name in self.document_fields}


class ConfirmDeleteForm(FlaskForm):
    submit = SubmitField('Delete')
