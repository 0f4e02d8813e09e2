# models_bootstrap.py
from user import models as _user_models
from department import models as _department_models
from category import models as _category_models
from question import models as _question_models
from reviewcycle import models as _reviewcycle_models
from assignment import models as _assignment_models
from feedback import models as _feedback_models
