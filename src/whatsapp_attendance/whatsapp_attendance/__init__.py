"""WhatsApp attendance package.

Feature modules (employees, attendance, messaging, settings) each carry a
model, a repository protocol with its MySQL implementation and a service;
Flask controllers are a thin JSON layer on top.
"""
