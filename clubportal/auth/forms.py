from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Email, Length, ValidationError


class MinPasswordLength:
    """Enforces the app's MIN_PASSWORD_LENGTH, the same minimum the identity client applies."""

    def __call__(self, form, field):
        minimum = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
        if len(field.data or '') < minimum:
            raise ValidationError(f'Password must be at least {minimum} characters.')


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])
    submit = SubmitField('Sign in')


class SetupSuperAdminForm(FlaskForm):
    username = StringField('Display Name', validators=[DataRequired(), Length(max=80)])
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired(), MinPasswordLength()])
    submit = SubmitField('Register as Super Admin')
