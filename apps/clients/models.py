from django.db import models


class Client(models.Model):
    """A studio customer who commissions projects."""

    name = models.CharField(max_length=200)
    company = models.CharField(max_length=200)
    number = models.CharField(max_length=30)
    email = models.EmailField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        ordering = ['name']
        indexes = [
            models.Index(fields=['name'], name='clients_name_idx'),
            models.Index(fields=['company'], name='clients_company_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.company})"
