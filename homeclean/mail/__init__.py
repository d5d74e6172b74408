from .client import Mailer, render_table
