from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, EmailField, SubmitField
from wtforms.validators import DataRequired, Email, Length

from clubportal.auth.forms import MinPasswordLength


class ProvisionAccountForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired(), Length(max=80)])
    email = EmailField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password (for the new account)', validators=[DataRequired(), MinPasswordLength()])
    acting_password = PasswordField('Your Password (to restore your session)', validators=[DataRequired()])
    submit = SubmitField('Create Account')


class RemoveAccountForm(FlaskForm):
    submit = SubmitField('Delete')
