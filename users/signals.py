from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile, User


@receiver(post_save, sender=User)
def create_profile(sender, instance: User, created: bool, **kwargs):
    """Create a customer profile for every new user."""
    if not created:
        return

    if Profile.objects.filter(user=instance).exists():
        return

    Profile.objects.create(
        user=instance,
        first_name=instance.first_name,
        last_name=instance.last_name,
        role=Profile.Role.ADMIN if instance.is_superuser else Profile.Role.CUSTOMER,
    )
