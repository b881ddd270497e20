# examples/gmail_send.py

"""
Gmail Send Example, using gmailsend

Requirements to Work:
- Gmail API must be enabled on your Google Cloud project:
    -> https://console.cloud.google.com/apis/library/gmail.googleapis.com
- An OAuth client of type "Desktop app" downloaded as gmailsend_credentials.json
- A token saved by running `python -m gmailsend authorize` once
"""

import gmailsend

client = gmailsend.MailClient()

email = gmailsend.Email(
    to=["someone@example.com"],
    subject="Hello from gmailsend",
    body="This is a test email sent via the Gmail API.",
)
email.attach_file("notes.txt", b"Sent with an attachment.\n")

result = client.send_email(email)

print("Sent:", result.success)
print("Result:", result.to_dict())
