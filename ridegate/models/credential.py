"""
Refresh Credential
------------------

The single live refresh token of a user. Storing a new token overwrites the
row, which is what revokes the previous one.
"""

from tortoise import Model, fields


class RefreshCredential(Model):
    id = fields.IntField(pk=True)
    user = fields.OneToOneField("models.User", related_name="credential", on_delete=fields.CASCADE)
    token = fields.TextField()
    expires_at = fields.DatetimeField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "refresh_credential"

    def __str__(self):
        return f"[{self.id}] credential for user {self.user_id} (expires {self.expires_at})"
