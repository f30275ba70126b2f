"""Element ids the dashboard mounts onto."""

DASHBOARD_PARENT = "dashboard-parent"
CONTACTS_BODY = "contacts-body"
SERVER_TIME = "server-time"
ADD_CONTACT_FORM = "add-contact-form"
SUBMIT_BUTTON = "submit-button"
STATUS = "status"
